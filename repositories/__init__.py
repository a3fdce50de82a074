"""
repositories/ - Data Access Layer
==================================
Table-oriented helpers built on the database layer.
Each helper builds one parameterized statement and returns plain dict rows.
"""
