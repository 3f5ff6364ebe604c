"""Routing — ordered route tables, template compilation, matching and URL generation.

Routes are tried in declaration order; the first structural and host match
decides the outcome.
"""
