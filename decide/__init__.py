# DECIDE Engine
# Launch Interceptor Condition evaluation

"""
Core invariant: data flows strictly forward, points and parameters to
CMV to PUM to FUV to the launch decision, and no stage mutates the
output of an earlier one.
"""
