"""Command line and other user-facing interfaces."""
