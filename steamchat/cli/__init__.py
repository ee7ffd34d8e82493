"""steamchat command line interface."""
