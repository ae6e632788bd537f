"""pillars -- scaffold layered Node.js/Express projects and components."""

__version__ = "1.0.0"
