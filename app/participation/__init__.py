"""
Participation app: debates, proposals, comments, votes and flags.

Accounts author debates, proposals and comments, vote on votables and
flag inappropriate content. Blocking an account hides everything it has
authored (see accounts.models.User.block).

Usage:
    from participation.models import Debate, Proposal, Comment, Vote, Flag
"""
