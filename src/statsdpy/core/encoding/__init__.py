"""Wire encoders for StatsD lines."""
