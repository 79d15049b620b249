"""Flashcard authoring backend: turns source text and images into validated
question/answer cards through a hosted language model."""

__version__ = '1.0.0'
