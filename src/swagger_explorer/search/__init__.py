"""Keyword search and prose summaries over projected endpoints."""

from .endpoint_search import EndpointSearch, matches
from .summarizer import summarize

__all__ = ["EndpointSearch", "matches", "summarize"]
