"""Rendering layer: components, retained regions and the reconciler."""
