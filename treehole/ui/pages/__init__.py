"""Page and fragment routes."""
