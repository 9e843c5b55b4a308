"""
tickrisk: Core Type Definitions

This module defines common type aliases shared across the tickrisk
codebase. It exists to centralise frequently used type definitions and
avoid circular imports between higher-level modules.

External dependencies:
- numpy: ``numpy.typing.NDArray`` for vector/matrix aliases

Thread safety: Thread-safe (no mutable global state)

Author: tickrisk Team
Created: 2026-10-18
Last Modified: 2026-10-18
Status: Development
Version: v0.1.0
"""

# ============================================================================
# Imports
# ============================================================================

from __future__ import annotations

from typing import TypeAlias

import numpy as np
from numpy.typing import NDArray

# ============================================================================
# Type Aliases
# ============================================================================

# Opaque member key, typically a ticker symbol such as "INTC"
Identifier: TypeAlias = str

# Weight vector ordered like the engine's members
WeightVector: TypeAlias = NDArray[np.float64]

# Square covariance matrix ordered like the engine's members
CovarianceMatrix: TypeAlias = NDArray[np.float64]
