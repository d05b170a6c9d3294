"""Retention decision engine.

This module provides policy validation, version directory
classification, count/age/pattern rules, empty directory pruning and
the list/clean execution gate for local artifact repositories.
"""

from repoprune.retention.classifier import DirectoryClassifier, split_versions
from repoprune.retention.errors import (
    ConfigurationError,
    DeletionError,
    RepositoryEnvironmentError,
    RetentionError,
)
from repoprune.retention.evaluator import RetentionEvaluator, elapsed_days
from repoprune.retention.gate import DeferredDeletionQueue, ExecutionGate
from repoprune.retention.gateway import FilesystemGateway, LocalFilesystem
from repoprune.retention.matcher import PatternMatcher
from repoprune.retention.models import (
    ArtifactCoordinate,
    CleanupPolicy,
    CleanupReport,
    DeletionCandidate,
    DeletionReason,
    DeletionResult,
    ExecutionMode,
    RetentionRule,
    VersionDirectory,
)
from repoprune.retention.pipeline import CleanupRunner
from repoprune.retention.policy import build_policy
from repoprune.retention.pruner import EmptyDirectoryPruner
from repoprune.retention.purge import purge_repository

__all__ = [
    "ArtifactCoordinate",
    "CleanupPolicy",
    "CleanupReport",
    "CleanupRunner",
    "ConfigurationError",
    "DeferredDeletionQueue",
    "DeletionCandidate",
    "DeletionError",
    "DeletionReason",
    "DeletionResult",
    "DirectoryClassifier",
    "EmptyDirectoryPruner",
    "ExecutionGate",
    "ExecutionMode",
    "FilesystemGateway",
    "LocalFilesystem",
    "PatternMatcher",
    "RepositoryEnvironmentError",
    "RetentionError",
    "RetentionEvaluator",
    "RetentionRule",
    "VersionDirectory",
    "build_policy",
    "elapsed_days",
    "purge_repository",
    "split_versions",
]
