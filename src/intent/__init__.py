"""Intent translation and plan validation.

The intent layer converts a natural-language request into a normalized `QueryPlan`, which the
executor then applies deterministically to the project dataset.
"""
