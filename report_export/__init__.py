"""
Report export core: one document model rendered to print, word-processor,
workbook, delimited and raw formats, plus a time-bounded result cache.
"""

__version__ = "1.0.0"
