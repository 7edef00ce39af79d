"""Streamlit panel components."""
