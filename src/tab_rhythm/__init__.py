"""Rhythm quantization for rhythm-game guitar and bass arrangements."""
