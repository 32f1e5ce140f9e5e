"""
Building blocks of stdiocontext which do not depend on the package-level
configuration: slot swapping, placeholder streams and the context stack.
"""
