"""petassist.llm.adapters"""
