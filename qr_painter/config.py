# -*- coding: utf-8 -*-
"""Rendering configuration, overridable from the environment."""

import os


# Layout
GAP_SIZE = float(os.getenv("QR_GAP_SIZE", "0.25"))
EMBEDDED_IMAGE_RATIO = float(os.getenv("QR_EMBEDDED_IMAGE_RATIO", "0.25"))

# SVG fragment composition. Percentage sizes are resolved against this box.
FRAGMENT_REFERENCE_BOX = float(os.getenv("QR_FRAGMENT_REFERENCE_BOX", "320"))
FRAGMENT_SCALE = float(os.getenv("QR_FRAGMENT_SCALE", "0.25"))

# Web app
DEFAULT_SIZE = int(os.getenv("QR_DEFAULT_SIZE", "300"))
MAX_SIZE = int(os.getenv("QR_MAX_SIZE", "2000"))
LOG_LEVEL = os.getenv("QR_LOG_LEVEL", "INFO").upper()
