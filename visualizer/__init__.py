"""Mermaid visualizer backend: live diagram rendering with AI error detection."""
