"""petassist.health"""
