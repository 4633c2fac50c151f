"""REST API for Faultline."""
