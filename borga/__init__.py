"""
Borga - Board Game Group Organizer

Responsibilities:
- User registration and bearer-token identity
- Groups of board games, owned and edited by a single user
- Keeping users' group references consistent when groups are deleted
- Pacing calls to the external game catalog
"""
