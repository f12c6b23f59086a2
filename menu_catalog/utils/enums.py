class EditorState:
    OPEN = 'open'
    COMMITTING = 'committing'
    COMMITTED = 'committed'
    CANCELLED = 'cancelled'
