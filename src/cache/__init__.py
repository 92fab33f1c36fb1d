"""petassist.cache"""
