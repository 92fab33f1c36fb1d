"""petassist.llm"""
