"""Mode classification core."""

from .classifier import Classification, ModeClassifier
from .oracle import CommandOracle
from .router import ExecResult, InputRouter, RouteKind, RouteResult
from .rules import DETECTION_RULES, Detection, DetectionRule
from .suggest import suggest_command

__all__ = [
    "DETECTION_RULES",
    "Classification",
    "CommandOracle",
    "Detection",
    "DetectionRule",
    "ExecResult",
    "InputRouter",
    "ModeClassifier",
    "RouteKind",
    "RouteResult",
    "suggest_command",
]
