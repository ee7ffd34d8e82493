"""Core building blocks of the Steam session client."""
