"""petassist.config"""
