from __future__ import annotations

from mergemaster.domain.constants import CURRENT_VERSION

__version__ = CURRENT_VERSION
