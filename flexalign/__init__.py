"""Seeds, anchors, seed validation, paired-end scoring and MAPQ evaluation for short-read mapping."""

__version__ = "0.1.0"