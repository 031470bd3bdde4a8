"""
pagesplit: split a bundle archive of HTML pages into self-contained page packages.
"""
