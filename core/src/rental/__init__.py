"""Availability, pricing and reservation engine for the car rental platform."""
