"""petassist.api"""
