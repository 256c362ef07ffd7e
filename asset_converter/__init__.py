"""Asset Converter: express an amount of one asset in every other asset."""

__version__ = "0.1.0"
