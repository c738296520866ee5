"""Command-line front end: terminal session and typer app."""
