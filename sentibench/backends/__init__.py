"""
Inference backends for sentibench.
"""
