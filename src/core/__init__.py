"""petassist.core"""
