"""petassist.logging"""
