"""petassist.wizard"""
