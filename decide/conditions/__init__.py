# Conditions package for the DECIDE Engine
"""
The fifteen Launch Interceptor Conditions and the evaluator that
turns them into the Condition Met Vector.
"""
