"""
Model-backed helpers that work on an existing card set: per-card study
notes and Markdown mind maps.
"""
from .cache_manager import CacheManager
from .summarizer import CardSummarizer, SummarizerError
from .mindmap_generator import MindmapGenerator, MindmapResult, MindmapGeneratorError, generate_mindmap

__all__ = [
	'CacheManager',
	'CardSummarizer', 'SummarizerError',
	'MindmapGenerator', 'MindmapResult', 'MindmapGeneratorError', 'generate_mindmap',
]
