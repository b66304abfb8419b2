"""
Numerical tolerances used by the fitter.
"""

# A pivoted column whose remainder, after projecting out the columns
# pivoted before it, is shorter than this fraction of its own norm is
# treated as linearly dependent. Mirrors lm(tol = 1e-07), where dqrdc2
# compares each column's updated norm with its original norm.
RANK_TOLERANCE = 1e-7

# summary.lm() flags an "essentially perfect fit" when the residual variance
# falls below this multiple of (mean(fitted)^2 + var(fitted)).
PERFECT_FIT_TOLERANCE = 1e-30
