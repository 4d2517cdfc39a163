"""Policy — CI exit-code thresholds."""
