"""
Purpose: Package entry + stable exports.
What it does:

Marks routes as a Python package.

Routes domain package.

Public API:
- Domain models: Point, Route, Marker, RouteState, RouteColor, BuildStep
- Builder configuration: BuilderPolicy, default_builder_policy, click_to_place_policy
- Build session + validation: BuildSession, BuildPhase, BuildValidationError

The workflow itself is imported from routes.builder (it depends on store/).
"""
from .models import BuildStep, Marker, Point, Route, RouteColor, RouteState, DEFAULT_COLOR
from .policy import BuilderPolicy, click_to_place_policy, default_builder_policy
from .build_state import BuildPhase, BuildSession, BuildStateException
from .validation import BuildValidationError, ValidationCode

__all__ = ["Point",
           "Route",
             "Marker",
               "RouteState",
               "RouteColor",
               "BuildStep",
               "DEFAULT_COLOR",
               "BuilderPolicy",
               "default_builder_policy",
               "click_to_place_policy",
               "BuildPhase",
               "BuildSession",
               "BuildStateException",
               "BuildValidationError",
               "ValidationCode",
               ]
