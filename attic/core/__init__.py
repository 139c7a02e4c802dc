"""
Core utilities shared by every Attic layer: exceptions, logging and
filesystem paths.
"""
