"""Enumerations used by the scoring engine."""

from enum import Enum


class ComplianceState(str, Enum):
    """Overall verdict a reporter may derive for a profile.

    The profile evaluator records per-item pass/fail only. Which of these
    states a profile ends up in is a policy decision left to the caller.
    """

    PASS = "pass"
    """Every item the caller's policy considers mandatory passed."""

    FAIL = "fail"
    """At least one mandatory item failed."""

    SKIPPED = "skipped"
    """The profile does not apply to the document (e.g. wrong spec)."""


class GraphStatus(str, Enum):
    """Outcome of a dependency graph reachability analysis."""

    NO_PRIMARY = "no_primary"
    """The document has no identifiable primary component."""

    NO_DEPENDENCIES = "no_dependencies"
    """No dependency edges are declared."""

    PRIMARY_UNDECLARED = "primary_undeclared"
    """The primary component declares nothing while other components do."""

    UNDEFINED_SOURCE = "undefined_source"
    """An edge starts at an id that is not a component."""

    UNDEFINED_TARGET = "undefined_target"
    """An edge points at an id that is not a component."""

    UNREACHABLE = "unreachable"
    """Some components cannot be reached from the primary component."""

    COMPLETE = "complete"
    """Every component is reachable from the primary component."""
