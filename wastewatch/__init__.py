"""
WasteWatch - waste reporting and cleanup assignment service
"""
