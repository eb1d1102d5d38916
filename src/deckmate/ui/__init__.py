"""PyQt6 hot-seat viewer for the rule engine."""
