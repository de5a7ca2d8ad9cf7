"""QR Style Studio: design styled QR codes with a live preview."""

__version__ = "0.1.0"
