"""
Title Extraction Module

Turns a free-form model reply into a validated ResultSet of three book titles
(benefit, curiosity, doubleEntendre) by trying increasingly permissive
recovery strategies until one yields a complete record.
"""
