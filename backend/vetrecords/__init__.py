"""Veterinary records API: pets, vaccines, allergies and dashboard stats."""

__version__ = "0.1.0"
