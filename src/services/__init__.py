"""petassist.services"""
