"""rollups-node: supervisor for the rollups auxiliary service processes."""
