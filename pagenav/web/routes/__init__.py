"""HTTP routes of the navigation web application."""
