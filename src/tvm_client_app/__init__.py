"""Command-line application for the TVM client."""
