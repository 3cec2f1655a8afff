"""Internal transport exports for drivelink."""

from __future__ import annotations

from . import endpoints
from .graph_transport import GraphResponse, GraphTransport, classify_status

__all__ = ["GraphResponse", "GraphTransport", "classify_status", "endpoints"]
