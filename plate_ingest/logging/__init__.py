"""Labelled console logging and the JSON-lines issue log."""
