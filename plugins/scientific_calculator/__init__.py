"""Scientific Calculator plugin manifest."""

manifest = {
    "title": "Scientific Calculator",
    "summary": "Evaluate arithmetic with powers, degree-based trig, logs and constants.",
    "category": "General Utilities",
    "blueprint": "scientific_calculator",
    "api": "/api/scientific_calculator",
}

__all__ = ["manifest"]
