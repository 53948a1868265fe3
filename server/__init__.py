"""HTTP surface for aibridge."""
