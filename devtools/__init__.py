"""Developer tools web service: image conversion, favicons, OG cards and theme CSS."""

__version__ = "0.1.0"
