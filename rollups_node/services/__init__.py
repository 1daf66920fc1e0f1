"""
Services for running the node.

Supervision of auxiliary processes lives in the supervision/ subpackage.
"""
