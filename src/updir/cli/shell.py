"""Shell integration snippets."""

# `ud`: run pd and cd into the directory it prints
UD_FUNCTION = r'''ud() {
    local clear_line=$(tput el) # Clear line from cursor to end
    local ret retcode
    ret="$(command pd "$@")"; retcode=$?
    if test "$retcode" -ne 0; then
        if test -n "$ret"; then
            printf "\r${clear_line}%s" "$ret" >&2
        else
            printf "\r${clear_line}"
        fi
    else
        printf "\r${clear_line}%s\n" "$ret"
        cd "$ret"
    fi
    return "$retcode"
}
'''
