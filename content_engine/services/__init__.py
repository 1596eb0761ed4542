"""Domain services for the content engine seeders."""
