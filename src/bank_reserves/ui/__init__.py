"""
Streamlit user interface for the bank reserves lookup.
"""
