"""Implementation modules behind ``scopegate.base.suppressor``."""
