"""Implementation modules behind ``scopegate.base.cancellation``.

Import from the facade; these modules are split one class per file.
"""
