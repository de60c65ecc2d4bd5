"""In-process counters and histograms for cache activity."""
