"""petassist — AI pet care assistant."""
