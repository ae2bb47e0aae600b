# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Eden Academy curation backend.

Curation sessions, decision tracking and curator analytics for the
works produced by Eden Academy agents.
"""

__version__ = "1.0.0"
