"""stream-prefs — preference definition and validation engine."""
