"""pkgboundaries — enforce dependency directions between architectural layers."""

__version__ = "0.1.0"
