"""Implementation modules behind ``scopegate.base.gate``."""
