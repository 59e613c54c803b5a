"""Library for the low level structure of each vCard dialect.

The plain text contentline layer lives in `component` and `property`, while
`xcard_element` and `hcard_element` wrap xml and html elements.
"""
