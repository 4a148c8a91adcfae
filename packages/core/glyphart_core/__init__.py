"""Core app services for settings, logging, generation control, and diagnostics."""

from .config import AppConfig, load_config, render_config, save_config
from .diagnostics import DiagnosticsExporter, build_doctor_payload
from .generation import GenerationController, GenerationState, GenerationStatus, GenerationSuperseded
from .performance import BudgetStatus, PerformanceController, PerformanceTargets

__all__ = [
    "AppConfig",
    "BudgetStatus",
    "DiagnosticsExporter",
    "GenerationController",
    "GenerationState",
    "GenerationStatus",
    "GenerationSuperseded",
    "PerformanceController",
    "PerformanceTargets",
    "build_doctor_payload",
    "load_config",
    "render_config",
    "save_config",
]
