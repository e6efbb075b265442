"""
Command-line interface entry points for the CC-CEDICT parser.

Entry points:
- cedict: Check, dump, search and re-format CC-CEDICT files
"""
