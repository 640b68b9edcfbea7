"""Django apps of the travel booking project."""
