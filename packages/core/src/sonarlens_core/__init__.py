"""Post SonarCloud pull request issues as GitHub review comments."""
