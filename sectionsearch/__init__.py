"""
Relevance ranking and structured filtering for course sections.
"""
