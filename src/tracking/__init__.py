"""petassist.tracking"""
