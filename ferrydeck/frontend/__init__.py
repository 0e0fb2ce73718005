"""Tkinter frontend: surface, renderer, pointer handling and the app."""
