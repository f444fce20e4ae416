"""Concrete builders for the files of an operator project."""
