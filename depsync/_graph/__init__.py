"""Dependency graph persistence and depth classification."""

from .classifier import DependencyGraphWriter, GraphWriteResult, PackageInfo, extract_package_info
from .memory import InMemoryGraphStore, InMemorySnapshotStore
from .models import MISSING_HASH, MISSING_LICENSE, MISSING_VERSION, DependencyNode, DependsOnEdge, Depth, NodeSelector
from .protocol import GraphStore, SnapshotStore

__all__ = [
    "DependencyGraphWriter",
    "GraphWriteResult",
    "PackageInfo",
    "extract_package_info",
    "GraphStore",
    "SnapshotStore",
    "InMemoryGraphStore",
    "InMemorySnapshotStore",
    "DependencyNode",
    "DependsOnEdge",
    "Depth",
    "NodeSelector",
    "MISSING_HASH",
    "MISSING_LICENSE",
    "MISSING_VERSION",
]
