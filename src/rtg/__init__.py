"""Reel template generator: scene segmentation and timeline allocation."""

__version__ = "0.1.0"
