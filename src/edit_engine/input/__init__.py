"""Keyboard input layer: normalized key events and their dispatch."""

from .dispatcher import KeyDispatcher
from .models import DispatchResult, KeyInput

__all__ = ["DispatchResult", "KeyDispatcher", "KeyInput"]
