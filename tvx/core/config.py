"""Test vector tooling configuration constants.

Constants are organized into:
- POLICY: Validation choices that deployments may tighten
- OPERATIONAL: Deployment-specific settings (env vars)
"""

import os

# =============================================================================
# POLICY CONSTANTS
# =============================================================================

# Strict validation adds checks beyond the receipt-count rule:
# - apply_message_failures indices must name an applied message
# - blockseq vectors must declare a genesis timestamp
# False (default): only the receipt-count and class/variant rules apply
VALIDATION_STRICT: bool = os.getenv("TVX_VALIDATION_STRICT", "false").lower() == "true"

# Reserved hints understood by drivers
HINT_INCORRECT: str = "incorrect"
HINT_NEGATE: str = "negate"

# =============================================================================
# OPERATIONAL SETTINGS (deployment-specific, via environment variables)
# =============================================================================

# Maximum size of a single vector document read from disk (64 MiB default).
# CAR blobs are embedded as base64, so real vectors can be large.
MAX_DOCUMENT_BYTES: int = int(
    os.getenv("TVX_MAX_DOCUMENT_BYTES", str(64 * 1024 * 1024))
)

# Logging
LOG_LEVEL: str = os.getenv("TVX_LOG_LEVEL", "INFO").upper()
LOG_FILE: str = os.getenv("TVX_LOG_FILE", "")
