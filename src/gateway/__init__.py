"""petassist.gateway"""
