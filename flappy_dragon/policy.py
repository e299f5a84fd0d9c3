def policy(env):
    # Strategy: keep the dragon hovering around the gap centre. Flap only once the
    # dragon has sunk below the centre and is no longer rising, so a flap is never
    # wasted while the previous one is still carrying it upward.
    player = env.game.player
    obstacle = env.game.obstacle

    if player.y > obstacle.gap_y and player.velocity >= 0:
        return [0, 1, 0]  # Flap
    return [0, 0, 0]  # Glide
