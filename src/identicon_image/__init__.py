"""Render 9-block identicons from 32-bit codes."""
