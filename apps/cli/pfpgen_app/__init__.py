"""Command line app for pfpgen."""
