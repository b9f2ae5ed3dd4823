"""Command line interface for the devtools server and client."""
