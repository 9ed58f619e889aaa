"""Fonctions de gestion de processus ``kp`` et ``fp`` et alias ``sr``.

- ``kp [-n|--dry-run] [SIGNAL] <motif>`` : envoie un signal aux
  processus dont la ligne de commande correspond au motif.
- ``fp <motif>`` : affiche un tableau lisible des processus
  correspondants.
- ``sr`` : recharge ``~/.zshrc``.
"""

from zsh_bootstrap.snippets.config import ShellSnippet

PROCESS_TOOLS_BLOCK = r'''
kp() {
  emulate -L zsh
  setopt pipefail

  local sig="-TERM"
  local dry=0

  while [[ $# -gt 0 ]]; do
    case "$1" in
      -n|--dry-run) dry=1; shift ;;
      -9|-KILL|-TERM|-HUP|-INT|-QUIT|-USR1|-USR2)
        sig="$1"; shift ;;
      --) shift; break ;;
      -*) sig="$1"; shift ;;
      *) break ;;
    esac
  done

  if [[ -z "$1" ]]; then
    echo "Usage: kp [-n|--dry-run] [SIGNAL] <pattern>"
    return 2
  fi

  local pattern="$*"
  local pids
  pids=$(pgrep -f -- "$pattern" 2>/dev/null) || true

  if [[ -z "$pids" ]]; then
    echo "kp: no processes found matching: $pattern"
    return 1
  fi

  echo "kp: matched PIDs:"
  echo "$pids" | tr ' ' '\n'

  if (( dry )); then
    echo "kp: dry-run, not killing."
    return 0
  fi

  echo "kp: sending $sig to PIDs..."
  echo "$pids" | xargs -r kill "$sig"
}

# Find process(es) by pattern and print a readable table.
# Usage:
#   fp <pattern>
fp() {
  emulate -L zsh
  setopt pipefail

  if [[ -z "$1" ]]; then
    echo "Usage: fp <pattern>"
    return 2
  fi

  local pattern="$*"
  local pids
  pids=$(pgrep -f -- "$pattern" 2>/dev/null) || true

  if [[ -z "$pids" ]]; then
    echo "fp: no processes found matching: $pattern"
    return 1
  fi

  echo "fp: found PIDs for \"$pattern\":"
  echo

  printf "%-12s %-7s %-6s %-6s %-8s %s\n" "USER" "PID" "%CPU" "%MEM" "START" "COMMAND"
  echo "--------------------------------------------------------------------------------"

  local pid
  for pid in ${(f)pids}; do
    ps -p "$pid" -o user=,pid=,%cpu=,%mem=,start=,args= 2>/dev/null | awk '
      {
        user=$1; pid=$2; cpu=$3; mem=$4; start=$5;
        $1=$2=$3=$4=$5="";
        sub(/^ +/,"",$0);
        cmd=$0;
        printf "%-12s %-7s %-6s %-6s %-8s %s\n", user, pid, cpu, mem, start, cmd
      }
    '
  done
}

alias sr="source ~/.zshrc"
'''.lstrip("\n")

PROCESS_TOOLS = ShellSnippet(
    marker="kp() {",
    content=PROCESS_TOOLS_BLOCK,
    checks=("fp() {", 'alias sr="source ~/.zshrc"'),
)
