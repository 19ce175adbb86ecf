"""
Link extraction - turns file paths into a stream of candidate links
"""

from .link import Link
from .extractor import extract_links, extract_links_from_file, find_urls, read_paths

__all__ = [
    'Link',
    'extract_links',
    'extract_links_from_file',
    'find_urls',
    'read_paths'
]
