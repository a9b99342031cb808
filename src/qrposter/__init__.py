"""
qrposter: branded UPI payment-QR poster configurator for PyQt6.

The user edits shop branding in a form, sees a live poster preview, and
downloads a print-ready PDF produced by a remote generation service.

Architecture:
- Tier 1 (Protocols): Configuration, preset catalog, preview handle contract
- Tier 2 (IO): httpx client for the generation endpoint and error taxonomy
- Tier 3 (Core): Field store, preview handles, validation, request lifecycle
- Tier 4 (Widgets/Windows): Preview projection and the configurator window

Key Features:
- Atomic field updates and preset merges (one notification per change)
- Temp-file preview handles released in lockstep with the logo field
- At most one in-flight exchange; superseded exchanges are discarded
- Classified, never-unhandled network and validation failures
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
