"""petassist.prompts"""
