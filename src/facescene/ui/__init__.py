"""Gradio user interface for Facescene."""
