"""REST API for the car rental availability and pricing engine."""
