"""
The fixed list of git commands printed on the sheet.

Scanners append Enter after each read, so every code is a complete command
and carries no newline.
"""

import dataclasses


@dataclasses.dataclass(frozen=True)
class GitCommand:
	code: str
	label: str
	description: str

	@property
	def display_label(self) -> str:
		"""
		Label shown under the symbol, falling back to the raw code.
		"""
		if self.label == "":
			return self.code
		return self.label


# 40 commands -> 4 x 10 grid
COMMANDS: tuple[GitCommand, ...] = (
	# status / inspection
	GitCommand("git status", "git status", "Show working tree status."),
	GitCommand("git status -sb", "git status -sb", "Short, branch-aware status."),
	GitCommand("git diff", "git diff", "Diff unstaged changes."),
	GitCommand("git diff --staged", "git diff --staged", "Diff staged changes."),
	# staging / restoring
	GitCommand("git add .", "git add .", "Stage all changes in current repo."),
	GitCommand("git add -p", "git add -p", "Interactive patch staging."),
	GitCommand("git restore .", "git restore .", "Discard unstaged changes in files."),
	GitCommand("git restore --staged .", "git restore --staged .", "Unstage all changes."),
	# common commit messages
	GitCommand('git commit -m "Initial commit"', "Initial commit", "Create an initial commit."),
	GitCommand('git commit -m "Update README"', "Update README", "Commit README changes."),
	GitCommand('git commit -m "Fix bug"', "Fix bug", "Commit a bugfix."),
	GitCommand('git commit -m "Refactor code"', "Refactor code", "Commit refactor changes."),
	# commit / log helpers
	GitCommand('git commit -m "WIP"', "WIP commit", "Quick work-in-progress commit."),
	GitCommand("git log --oneline --graph --decorate --all", "Pretty log", "Compact decorated log graph."),
	GitCommand("git log --oneline", "Log oneline", "Short one-line commit history."),
	GitCommand("git show", "git show", "Show details of the latest commit."),
	# stash
	GitCommand("git stash", "git stash", "Stash uncommitted changes."),
	GitCommand("git stash pop", "stash pop", "Apply and drop latest stash."),
	GitCommand("git stash list", "stash list", "List all stashes."),
	GitCommand("git stash drop", "stash drop", "Drop latest stash."),
	# branching / navigation
	GitCommand("git branch", "git branch", "List local branches."),
	GitCommand("git branch -vv", "git branch -vv", "Branches with tracking info."),
	GitCommand("git checkout -", "git checkout -", "Switch to previous branch."),
	GitCommand("git reflog", "git reflog", "Show reference log for HEAD history."),
	# sync / remotes
	GitCommand("git fetch --all --prune", "fetch --all", "Fetch all remotes and prune."),
	GitCommand("git pull", "git pull", "Pull from current upstream."),
	GitCommand("git push", "git push", "Push current HEAD to upstream."),
	GitCommand("git push --set-upstream origin HEAD", "push -u origin HEAD", "Push and set upstream."),
	# tags / metadata
	GitCommand("git tag", "git tag", "List tags."),
	GitCommand("git tag -l", "git tag -l", "List tags (pattern-capable)."),
	GitCommand("git remote -v", "git remote -v", "List remotes and URLs."),
	GitCommand("git config --list", "git config --list", "Show all Git config entries."),
	# search / history
	GitCommand('git grep -n "TODO"', "grep TODO", "Search TODO in tracked files."),
	GitCommand("git shortlog -sn", "shortlog -sn", "Author summary (commits per author)."),
	GitCommand("git rev-parse --show-toplevel", "repo root", "Show path to repo root."),
	GitCommand("git rev-parse --abbrev-ref HEAD", "current branch", "Show current branch name."),
	# cleanup / caution
	GitCommand("git status --ignored", "status ignored", "Status including ignored files."),
	GitCommand("git diff --stat", "diff --stat", "Diff summary (per-file stats)."),
	GitCommand("git clean -fd", "clean -fd", "Danger: remove untracked files & dirs."),
	GitCommand("git submodule update --init --recursive", "submodules", "Init and update submodules."),
)
