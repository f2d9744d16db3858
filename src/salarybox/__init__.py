"""Salary distribution box plots for uploaded player spreadsheets."""

__version__ = "0.1.0"
