"""petassist.storage"""
