"""Console front end for bot_manager."""
